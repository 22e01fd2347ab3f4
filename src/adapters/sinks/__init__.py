from .json_file_result_sink import JsonFileResultSink

__all__ = ["JsonFileResultSink"]
