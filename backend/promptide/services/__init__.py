from promptide.services.disk_file_store import DiskFileStore, disk_file_store

__all__ = [
    "DiskFileStore",
    "disk_file_store",
]
