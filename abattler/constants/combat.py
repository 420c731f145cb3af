"""Constants for combat calculations and mechanics."""


class CombatConstants:
    """Constants for combat calculations and mechanics."""

    # --- Basic attack ---
    # Damage = attack * (1 + randrange(BASIC_ATTACK_VARIANCE_STEPS) / 10)
    BASIC_ATTACK_VARIANCE_STEPS = 10

    # --- Dodge (monsters only) ---
    # Roll randrange(DODGE_DIE_SIDES); results below DODGE_THRESHOLD dodge.
    DODGE_DIE_SIDES = 4
    DODGE_THRESHOLD = 2

    # --- Combo / hero specials ---
    COMBO_THRESHOLD = 3
    # Each successful block adds 1/BLOCK_BONUS_DIVISOR to special move damage.
    BLOCK_BONUS_DIVISOR = 10

    # --- Blocking ---
    BLOCKED_DAMAGE_FRACTION = 0.3
    # Item defense factor: damage *= (DEFENSE_BUFF_PIVOT - defense_buff)
    DEFENSE_BUFF_PIVOT = 2.0

    # --- Flee ---
    FLEE_DIE_SIDES = 4  # Succeeds on a roll of 0
    FLEE_COUNTER_MULTIPLIER = 1.3

    # --- Monster AI ---
    MONSTER_SPECIAL_DIE_SIDES = 4  # Special move on a roll of 0


class ProgressionConstants:
    """Experience and levelling numbers."""

    XP_PER_LEVEL = 100.0
    MAX_HP_PER_LEVEL = 10.0
    ATTACK_PER_LEVEL = 3.0


class EncounterConstants:
    """Monster scaling and victory rewards."""

    # monster_level = 1 + monsters_defeated // DEFEATS_PER_MONSTER_LEVEL
    DEFEATS_PER_MONSTER_LEVEL = 3

    # hp = base_hp * (1 + level * HP_SCALING), same shape for attack
    HP_SCALING = 0.5
    ATTACK_SCALING = 0.3

    # xp = (VICTORY_XP_BASE + level * VICTORY_XP_PER_LEVEL) * bonus
    VICTORY_XP_BASE = 30.0
    VICTORY_XP_PER_LEVEL = 5.0
    ELEMENTAL_XP_BONUS = 1.2

    DROP_DIE_SIDES = 2  # Item drop on a roll of 0
