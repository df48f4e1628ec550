from enum import Enum


class MessageConst(str, Enum):
    MISSING_DOCUMENT = "Cannot find task with specified id."
    ILLEGAL_STATUS = "Cannot remove file for task, because status is different than CREATED."
    STORAGE_FAULT = "File storage operation failed."


class TaskServiceError(Exception):
    """Base class for errors raised by the task service layer."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingEntityError(TaskServiceError):
    """Referenced task does not exist."""

    def __init__(self, message: str = MessageConst.MISSING_DOCUMENT.value):
        super().__init__(message)


class IllegalLifecycleStateError(TaskServiceError):
    """File or task mutation attempted while the task is no longer CREATED."""

    def __init__(self, message: str = MessageConst.ILLEGAL_STATUS.value):
        super().__init__(message)


class StorageFaultError(TaskServiceError):
    """I/O failure in the file storage."""

    def __init__(self, message: str = MessageConst.STORAGE_FAULT.value, path=None):
        super().__init__(message)
        self.path = path


class FileTooLargeError(TaskServiceError):
    """Uploaded file is larger than the configured limit."""

    def __init__(self, file_name: str, max_size: int):
        super().__init__(f"File {file_name} exceeds maximum allowed size of {max_size} bytes")
        self.file_name = file_name
        self.max_size = max_size
