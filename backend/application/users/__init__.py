from application.users.user_directory_service import UserDirectoryService

__all__ = ["UserDirectoryService"]
