from dataclasses import dataclass, replace

"""
Dataclass definition for PSO control parameters.

The defaults are the recommended linearly-decaying schedule: inertia
0.9 -> 0.4, velocity clamp 0.5 -> 0.1 of each dimension's range, with
equal cognitive and social pull. Values are not validated; out-of-range
settings only degrade solution quality.
"""


@dataclass(frozen=True)
class PSOParams:
    initial_inertia: float = 0.9
    final_inertia: float = 0.4
    cognitive: float = 2.0
    social: float = 2.0
    initial_vmax_frac: float = 0.5
    final_vmax_frac: float = 0.1
    target_precision: float = 1e-5
    stagnation_iters: int = 50

    def with_overrides(self, **changes) -> "PSOParams":
        """Copy with every non-None entry of `changes` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def schedule(self, iteration: int, max_iters: int) -> tuple[float, float]:
        """Inertia weight and velocity-clamp factor for `iteration` of `max_iters`."""
        if max_iters <= 0:
            return self.initial_inertia, self.initial_vmax_frac
        t = iteration / max_iters
        w = self.initial_inertia - (self.initial_inertia - self.final_inertia) * t
        vmax_frac = self.initial_vmax_frac - (self.initial_vmax_frac - self.final_vmax_frac) * t
        return w, vmax_frac


DEFAULT = PSOParams()

# Fixed constriction-like inertia, the classic "strong" profile.
CONSTANT_INERTIA = PSOParams(
    initial_inertia=0.729, final_inertia=0.729,
    cognitive=1.49445, social=1.49445,
    initial_vmax_frac=0.2, final_vmax_frac=0.2,
)

# Wider velocity clamp and stronger personal pull for rugged landscapes.
EXPLORATIVE = PSOParams(
    initial_inertia=0.95, final_inertia=0.4,
    cognitive=2.5, social=1.5,
    initial_vmax_frac=0.8, final_vmax_frac=0.1,
    stagnation_iters=100,
)

PRESETS = {
    "default": DEFAULT,
    "constant": CONSTANT_INERTIA,
    "explorative": EXPLORATIVE,
}
