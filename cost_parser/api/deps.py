from typing import Annotated

from fastapi import Depends

from cost_parser.schemas.cost import CustomerEntry
from cost_parser.state import global_state


def get_customer_registry() -> list[CustomerEntry]:
    return list(global_state.customer_registry or [])


CustomerRegistryDep = Annotated[list[CustomerEntry], Depends(get_customer_registry)]
