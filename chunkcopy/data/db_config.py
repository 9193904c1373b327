import pydantic

from chunkcopy.data.api import API

__all__ = ("DbConfig",)


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=pydantic.ConfigDict(strict=True))
class DbConfig:
    db_id: str
    api: API
    host: str | None
    port: int | None
    db_name: str | None
    keyring_db_username_entry: str | None
    keyring_db_password_entry: str | None
    connection_string: pydantic.SecretStr | None

    def __repr__(self) -> str:
        return f"DbConfig(db_id={self.db_id!r}, api={self.api!r})"
