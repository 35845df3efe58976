from pathlib import Path
from typing import Awaitable, Callable, Dict, Iterable, Mapping, Tuple, Union

import pandas as pd

Snapshot = Tuple[Dict, ...]


def frame_to_records(df: pd.DataFrame) -> Snapshot:
    """DataFrame rows as plain dicts; missing cells become None."""
    cleaned = df.astype(object).where(df.notna(), None)
    return tuple(cleaned.to_dict(orient="records"))


def read_table(handle, name: str) -> pd.DataFrame:
    """
    Read a .csv/.xlsx/.xls/.json table from a path or an open file-like object
    (e.g. a streamlit upload). `name` only decides the format.
    """
    suffix = Path(name).suffix.lower()
    if suffix in {".xlsx", ".xls"}:
        return pd.read_excel(handle)
    if suffix == ".csv":
        return pd.read_csv(handle)
    if suffix == ".json":
        return pd.read_json(handle, orient="records", convert_dates=False)
    raise ValueError("Unsupported file type. Use .csv, .xlsx or .json")


def load_snapshot(source: Union[str, Path, pd.DataFrame, Iterable[Mapping]]) -> Snapshot:
    """
    Materialize a record snapshot as a tuple of plain dicts.
    Accepts a DataFrame, an iterable of mappings, or a .csv/.xlsx/.json path.
    Missing cells come back as None.
    """
    if source is None:
        raise ValueError("source is None")
    if isinstance(source, pd.DataFrame):
        return frame_to_records(source)
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(path)
        return frame_to_records(read_table(path, path.name))
    return tuple(dict(record) if isinstance(record, Mapping) else record for record in source)


async def fetch_snapshot(fetch: Callable[[], Awaitable]) -> Snapshot:
    """
    Await an external fetch (e.g. a database query) and freeze its result.
    This is the only suspension point; everything downstream is synchronous.
    """
    records = await fetch()
    if records is None:
        raise ValueError("fetch returned no records")
    return load_snapshot(records)
