# app/params.py
from starlette.datastructures import ImmutableMultiDict


def first_value(values: ImmutableMultiDict, key: str) -> str:
    """First text value sent for ``key``, or "" when there is none.

    Item access on Starlette's multidicts returns the last duplicate; form
    handlers here keep the first one. File parts are not text and read as "".
    """
    for value in values.getlist(key):
        return value if isinstance(value, str) else ""
    return ""
