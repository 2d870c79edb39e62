"""Guest stepper state behind the adults/children dropdown."""

from dataclasses import dataclass

from src.schemas.stay_schema import MAX_ADULTS, MAX_CHILDREN


@dataclass
class GuestStepper:
    """Plus/minus counters; at least one adult is always kept."""

    adults: int = 2
    children: int = 0

    def __post_init__(self) -> None:
        self.adults = min(MAX_ADULTS, max(1, self.adults))
        self.children = min(MAX_CHILDREN, max(0, self.children))

    def increment(self, kind: str) -> None:
        if kind == "adults":
            self.adults = min(self.adults + 1, MAX_ADULTS)
        elif kind == "children":
            self.children = min(self.children + 1, MAX_CHILDREN)
        else:
            raise ValueError(f"Unknown guest kind: {kind}")

    def decrement(self, kind: str) -> None:
        if kind == "adults":
            self.adults = max(self.adults - 1, 1)
        elif kind == "children":
            self.children = max(self.children - 1, 0)
        else:
            raise ValueError(f"Unknown guest kind: {kind}")

    @property
    def display_value(self) -> str:
        return str(self.adults + self.children)

    def as_form_values(self) -> dict[str, str]:
        return {"adults": str(self.adults), "children": str(self.children)}
