from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

# Exact in Python, plain JSON numbers on the wire.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
