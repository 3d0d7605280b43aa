"""Package manager: permission store, access control, deployment lifecycle."""

from .controller import AccessController, FriendInterface, PublicInterface
from .deployment import Deployment, init_module, initialize_for_test
from .store import PermissionStore

__all__ = [
    "PermissionStore",
    "AccessController",
    "PublicInterface",
    "FriendInterface",
    "Deployment",
    "init_module",
    "initialize_for_test",
]
