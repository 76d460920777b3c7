from sitebuilder.storage.interface import ProjectStorage
from sitebuilder.storage.memory import MemoryStorage, DEMO_USER_ID
from sitebuilder.storage.database import DatabaseStorage
from sitebuilder.storage.factory import create_storage, get_storage

__all__ = ['ProjectStorage', 'MemoryStorage', 'DatabaseStorage', 'DEMO_USER_ID', 'create_storage', 'get_storage']
