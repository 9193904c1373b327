from chunkcopy import data

__all__ = ("LOG_PREFIX", "build_sql")

LOG_PREFIX = "ChunkInsert"


def build_sql(*, migration: data.Migration, id_condition: str) -> str:
    destination_columns = ", ".join(migration.destination_columns)
    origin_columns = ", ".join(migration.origin_columns)
    tail = migration.filter().render(id_condition)
    return (
        f"insert ignore into {migration.destination_name} ({destination_columns}) "
        f"select {origin_columns} from {migration.origin_name} {tail}"
    )
