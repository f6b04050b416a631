from cost_parser.schemas.cost import CustomerEntry


class AppState:
    customer_registry: list[CustomerEntry] | None = None


global_state = AppState()
