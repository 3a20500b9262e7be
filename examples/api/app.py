"""API — a small JSON items service.

CRUD for an "items" resource. Demonstrates junction's dispatch pipeline:
path parameters, pydantic body validation, bearer-token auth on writes,
CORS for browser clients, and structured errors from ``HTTPError``.

Run the checks:
    pytest examples/api
"""

import threading
from dataclasses import dataclass

from pydantic import BaseModel

from junction import (
    AuthConfig,
    CORSConfig,
    CORSPlugin,
    Dispatcher,
    ErrorHandlingPlugin,
    HTTPError,
    NotFound,
    Request,
    RequestContext,
    RouteConfig,
    ValidationSchema,
)

API_TOKEN = "s3cret"


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Item:
    id: int
    title: str
    done: bool


_items: dict[int, Item] = {}
_next_id = 1
_lock = threading.Lock()


def _get_next_id() -> int:
    global _next_id
    with _lock:
        n = _next_id
        _next_id += 1
        return n


def _to_dict(item: Item) -> dict:
    return {"id": item.id, "title": item.title, "done": item.done}


def _lookup(item_id: int) -> Item:
    with _lock:
        item = _items.get(item_id)
    if item is None:
        raise NotFound(f"No item {item_id}")
    return item


# ---------------------------------------------------------------------------
# Validators and auth
# ---------------------------------------------------------------------------


class NewItem(BaseModel):
    title: str


class ItemChanges(BaseModel):
    title: str | None = None
    done: bool | None = None


def item_params(params: dict[str, str]) -> dict[str, int]:
    if not params["item_id"].isdigit():
        raise ValueError("item_id must be a positive integer")
    return {"item_id": int(params["item_id"])}


def paging(query: dict[str, str]) -> dict[str, int]:
    limit = int(query.get("limit", "50"))
    offset = int(query.get("offset", "0"))
    return {"limit": min(max(limit, 1), 100), "offset": max(offset, 0)}


def verify_token(request: Request) -> str:
    header = request.headers.get("authorization", "")
    if header != f"Bearer {API_TOKEN}":
        raise PermissionError("Invalid or missing API token")
    return "api-client"


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def list_items(ctx: RequestContext):
    """List items with optional limit and offset."""
    page_opts = ctx.data.query
    with _lock:
        all_items = sorted(_items.values(), key=lambda x: x.id)
    start = page_opts["offset"]
    page = all_items[start : start + page_opts["limit"]]
    return {
        "data": [_to_dict(i) for i in page],
        "meta": {**page_opts, "total": len(all_items)},
    }


def get_item(ctx: RequestContext):
    return {"data": _to_dict(_lookup(ctx.data.params["item_id"]))}


def create_item(ctx: RequestContext):
    title = ctx.data.body.title.strip()
    if not title:
        raise HTTPError(422, "title must not be blank", code="BLANK_TITLE")
    item = Item(id=_get_next_id(), title=title, done=False)
    with _lock:
        _items[item.id] = item
    return {"data": _to_dict(item)}, 201


def update_item(ctx: RequestContext):
    item = _lookup(ctx.data.params["item_id"])
    changes = ctx.data.body
    updated = Item(
        id=item.id,
        title=changes.title.strip() if changes.title is not None else item.title,
        done=changes.done if changes.done is not None else item.done,
    )
    with _lock:
        _items[item.id] = updated
    return {"data": _to_dict(updated)}


def delete_item(ctx: RequestContext):
    item = _lookup(ctx.data.params["item_id"])
    with _lock:
        _items.pop(item.id, None)
    return None


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


async def build() -> Dispatcher:
    dispatcher = Dispatcher(auth=AuthConfig(verify=verify_token))
    await dispatcher.register_plugin(
        CORSPlugin(
            CORSConfig(
                allow_origins=("*",),
                allow_methods=("GET", "POST", "PUT", "DELETE", "OPTIONS"),
                allow_headers=("Content-Type", "Authorization"),
            )
        )
    )
    await dispatcher.register_plugin(ErrorHandlingPlugin())

    by_id = ValidationSchema(params=item_params)
    paged = ValidationSchema(query=paging)
    await dispatcher.get("/api/items", RouteConfig(validation=paged), list_items)
    await dispatcher.get("/api/items/:item_id", RouteConfig(validation=by_id), get_item)
    await dispatcher.post(
        "/api/items",
        RouteConfig(auth=True, validation=ValidationSchema(body=NewItem)),
        create_item,
    )
    await dispatcher.put(
        "/api/items/:item_id",
        RouteConfig(auth=True, validation=ValidationSchema(params=item_params, body=ItemChanges)),
        update_item,
    )
    await dispatcher.delete(
        "/api/items/:item_id", RouteConfig(auth=True, validation=by_id), delete_item
    )
    return dispatcher
