from .generated import Base, Bookings, Courts, PointTransactions, Users, Venues

__all__ = [
    "Base",
    "Bookings",
    "Courts",
    "PointTransactions",
    "Users",
    "Venues",
]
