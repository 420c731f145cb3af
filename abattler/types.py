from __future__ import annotations

from typing import NewType, TypeAlias

# =============================================================================
# COMBAT VALUES
# =============================================================================

# Hit points are fractional: multipliers (elements, effects, items) are applied
# to raw damage without rounding, and the display layer formats them.
HitPoints: TypeAlias = float

# Number of full rounds an effect stays active. Decremented once per round.
TurnCount: TypeAlias = int

# =============================================================================
# RANDOMNESS
# =============================================================================

# Master seed for the RNG provider. ``None`` means "derive from the clock".
RandomSeed: TypeAlias = int | str | None

# =============================================================================
# TIME
# =============================================================================

# Wall-clock seconds, used only by the timed block challenge.
Seconds = NewType("Seconds", float)
