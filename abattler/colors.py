from abattler.game.enums import ElementalType

# Type alias for RGB colors
Color = tuple[int, int, int]

# Basic colors
WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
GREEN: Color = (0, 255, 0)
YELLOW: Color = (255, 255, 0)
ORANGE: Color = (255, 165, 0)
GREY: Color = (128, 128, 128)
LIGHT_GREY: Color = (200, 200, 200)
LIGHT_BLUE: Color = (173, 216, 230)

# Narration colors
PLAYER_ACTION: Color = LIGHT_BLUE
MONSTER_ACTION: Color = (255, 120, 80)
DAMAGE_TAKEN: Color = (230, 60, 60)
DODGE: Color = LIGHT_GREY
HEAL: Color = (120, 220, 120)
STATUS_APPLIED: Color = (200, 120, 255)
STATUS_EXPIRED: Color = GREY
BLOCK_SUCCESS: Color = (90, 200, 255)
BLOCK_FAILED: Color = ORANGE
LEVEL_UP: Color = (255, 215, 0)
VICTORY: Color = GREEN
DEFEAT: Color = RED
ITEM: Color = (255, 200, 120)
EFFECTIVENESS: Color = YELLOW

ELEMENT_COLORS: dict[ElementalType, Color] = {
    ElementalType.NORMAL: WHITE,
    ElementalType.FIRE: (255, 100, 40),
    ElementalType.ICE: (140, 210, 255),
    ElementalType.POISON: (150, 220, 60),
    ElementalType.UNDEAD: (180, 160, 200),
}
