"""Permissions Management"""
import logging
import yaml
from pathlib import Path
from typing import Dict, List, Union

logger = logging.getLogger(__name__)


class PermissionsManager:
    """Manages role-to-permissions mapping from permissions.yml"""

    def __init__(self, permissions_file_path: Union[str, Path, None] = None):
        if permissions_file_path is None:
            from app import config
            permissions_file_path = config.PERMISSIONS_FILE

        self.role_permissions = self._load_permissions(Path(permissions_file_path))

    def _load_permissions(self, file_path: Path) -> Dict[str, List[str]]:
        """Load role-to-permissions mapping from YAML file"""
        if not file_path.exists():
            logger.warning(f"Permissions file not found: {file_path}; every role gets no permissions")
            return {}
        with open(file_path, "r") as f:
            data = yaml.safe_load(f) or {}
        return {role: list(perms or []) for role, perms in data.get("roles", {}).items()}

    def get_permissions_for_role(self, role: str) -> List[str]:
        return sorted(self.role_permissions.get(role, []))

    def role_has(self, role: str, permission: str) -> bool:
        return permission in self.role_permissions.get(role, [])
