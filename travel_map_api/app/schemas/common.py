"""Field types shared by several schemas."""

from typing import Annotated, Union

from pydantic import Field, StrictFloat, StrictInt


# Finite JSON numbers only: booleans, numeric strings, NaN and
# infinities are rejected.
Number = Union[StrictInt, Annotated[StrictFloat, Field(allow_inf_nan=False)]]
