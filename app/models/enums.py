from enum import Enum

class EventStatus(str, Enum):
    Pending = "pending"
    Approved = "approved"
    Rejected = "rejected"
