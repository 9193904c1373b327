import functools
import os
import pathlib

from chunkcopy import data

__all__ = (
    "CONFIG_PATH_ENV_VAR",
    "LOG_FOLDER_ENV_VAR",
    "get_config_path",
    "get_log_folder",
)

CONFIG_PATH_ENV_VAR = "CHUNKCOPY_CONFIG"
LOG_FOLDER_ENV_VAR = "CHUNKCOPY_LOG_FOLDER"


@functools.lru_cache
def _root_dir() -> pathlib.Path | data.Error:
    try:
        return next(p for p in pathlib.Path(__file__).parents if (p / "chunkcopy").is_dir())
    except StopIteration:
        return data.Error.new(f"chunkcopy not found in path, {__file__}.")


def get_config_path() -> pathlib.Path | data.Error:
    try:
        if override := os.environ.get(CONFIG_PATH_ENV_VAR):
            return pathlib.Path(override)

        root = _root_dir()
        if isinstance(root, data.Error):
            return root

        return root / "assets" / "config.json"
    except Exception as e:
        return data.Error.new(str(e))


def get_log_folder() -> pathlib.Path | data.Error:
    try:
        if override := os.environ.get(LOG_FOLDER_ENV_VAR):
            folder = pathlib.Path(override)
        else:
            root = _root_dir()
            if isinstance(root, data.Error):
                return root

            folder = root / "logs"

        folder.mkdir(parents=True, exist_ok=True)
        return folder
    except Exception as e:
        return data.Error.new(str(e), env_var=LOG_FOLDER_ENV_VAR)
