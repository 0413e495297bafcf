from skillbuilder.storage.base import SkillStore
from skillbuilder.storage.file_store import FileSkillStore
from skillbuilder.storage.sql_store import SqlSkillStore

__all__ = ["FileSkillStore", "SkillStore", "SqlSkillStore"]
