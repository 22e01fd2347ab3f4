from .file_execution_guard import FileExecutionGuard

__all__ = ["FileExecutionGuard"]
