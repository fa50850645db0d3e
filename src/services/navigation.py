"""Navigation outcomes returned by controllers; the UI performs the routing."""
from dataclasses import dataclass

LIST = "list"
EDIT = "edit"
CREATE = "create"


@dataclass(frozen=True)
class Destination:
    kind: str
    product_id: str | None = None

    @property
    def path(self) -> str:
        if self.kind == LIST:
            return "/list"
        if self.kind == EDIT:
            return f"/edit/{self.product_id}"
        return "/"


def go_to_list() -> Destination:
    return Destination(LIST)


def go_to_edit(product_id: str) -> Destination:
    return Destination(EDIT, product_id)


def go_to_create() -> Destination:
    return Destination(CREATE)
