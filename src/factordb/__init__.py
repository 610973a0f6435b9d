"""Python client for the FactorDB (http://factordb.com/) API.

Basic usage::

    from factordb import FactorDbBlockingClient

    with FactorDbBlockingClient() as client:
        forty_two = client.get(42)
        assert forty_two.flattened_factors() == [2, 3, 7]

All numeric values in results are plain ``int``.
"""

__version__ = "0.2.0"

from factordb.client import FactorDbBlockingClient, FactorDbClient  # noqa: E402
from factordb.config import Settings  # noqa: E402
from factordb.constants import ENDPOINT, DecodeErrorKind  # noqa: E402
from factordb.errors import (  # noqa: E402
    DecodeError,
    FactorDbError,
    InvalidNumber,
    RequestError,
)
from factordb.factor import Factor, FactorExpansion  # noqa: E402
from factordb.number import (  # noqa: E402
    Number,
    decode_number,
    decode_number_json,
)
from factordb.status import NumberStatus  # noqa: E402

__all__ = [
    "ENDPOINT",
    "DecodeError",
    "DecodeErrorKind",
    "Factor",
    "FactorDbBlockingClient",
    "FactorDbClient",
    "FactorDbError",
    "FactorExpansion",
    "InvalidNumber",
    "Number",
    "NumberStatus",
    "RequestError",
    "Settings",
    "__version__",
    "decode_number",
    "decode_number_json",
]
