from ._control_path import PathKey, create_path_builder

__all__ = ["PathKey", create_path_builder.__name__]
