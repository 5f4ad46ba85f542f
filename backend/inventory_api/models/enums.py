import enum


class StockMovementType(str, enum.Enum):
    ADD = "Add"
    REMOVE = "Remove"
    ADJUSTMENT = "Adjustment"


class UserRole(str, enum.Enum):
    """
    Authorization tiers, lowest first.

    The value is the only wire/storage representation; ordering comes from
    declaration order.
    """

    CASHIER = "Cashier"
    MODERATOR = "Moderator"
    SUPER_ADMIN = "SuperAdmin"

    @property
    def rank(self) -> int:
        return list(UserRole).index(self)

    def at_least(self, other: "UserRole") -> bool:
        return self.rank >= other.rank
