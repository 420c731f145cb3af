"""Item templates that can drop from monsters, plus the starting kit.

The healing items carry zero attack and defence buffs. While a salve is
active the hero deals no damage and takes double damage.
"""

from abattler.game.items.item_core import ItemType

HEALTH_POTION_TYPE = ItemType(
    name="Health Potion",
    description="Instantly restores 15 HP",
    heal_amount=15.0,
    attack_buff=0.0,
    defense_buff=0.0,
)

HEALING_SALVE_TYPE = ItemType(
    name="Healing Salve",
    description="Heals 5 HP per turn for 3 turns",
    duration=3,
    heal_amount=5.0,
    attack_buff=0.0,
    defense_buff=0.0,
)

WARRIORS_ELIXIR_TYPE = ItemType(
    name="Warrior's Elixir",
    description="Increases attack by 50% for 3 turns",
    duration=3,
    attack_buff=1.5,
)

STONE_SKIN_POTION_TYPE = ItemType(
    name="Stone Skin Potion",
    description="Increases defense by 50% for 3 turns",
    duration=3,
    defense_buff=1.5,
)

BATTLE_FLASK_TYPE = ItemType(
    name="Battle Flask",
    description="Increases both attack and defense by 25% for 2 turns",
    duration=2,
    attack_buff=1.25,
    defense_buff=1.25,
)

# Drop table. Order matters only for reproducible seeded runs.
ITEM_CATALOG: tuple[ItemType, ...] = (
    HEALTH_POTION_TYPE,
    HEALING_SALVE_TYPE,
    WARRIORS_ELIXIR_TYPE,
    STONE_SKIN_POTION_TYPE,
    BATTLE_FLASK_TYPE,
)

# The starting salve is stronger than the one monsters drop. Drops merge into
# the starter slot by name, so the starter stats win.
STARTER_ITEMS: tuple[ItemType, ...] = (
    HEALTH_POTION_TYPE.with_quantity(8),
    ItemType(
        name="Healing Salve",
        description="Heals 6 HP per turn for 4 turns",
        duration=4,
        heal_amount=6.0,
        attack_buff=0.0,
        defense_buff=0.0,
        quantity=8,
    ),
)
