from enum import Enum


class AdminRole(str, Enum):
    ADMIN = "admin"
    SUPERADMIN = "superadmin"
