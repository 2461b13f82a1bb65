"""Items — an in-memory CRUD API built from handler chains.

Demonstrates named path segments, query parameters, shared handlers
that load state for later ones, short-circuiting on errors, and
registration order deciding between overlapping routes.

Run:
    python app.py
"""

import itertools

from switchyard import App

app = App()

_items: dict[str, dict] = {}
_ids = itertools.count(1)


def require_token(request, response, next):
    """Reject writes without the demo bearer token."""
    if request.headers.get("authorization") != "Bearer demo":
        response.send("Unauthorized", status=401)
        return
    next()


def load_item(request, response, next):
    item = _items.get(request.params["id"])
    if item is None:
        response.json({"error": f"no item {request.params['id']}"}, status=404)
        return
    request.state["item"] = item
    next()


def index(request, response, next):
    response.send("items demo")


def list_items(request, response, next):
    items = list(_items.values())
    if "tag" in request.query:
        items = [i for i in items if request.query["tag"] in i.get("tags", [])]
    limit = request.query.get("limit")
    if limit is not None and limit.isdigit():
        items = items[: int(limit)]
    response.json(items)


def newest_item(request, response, next):
    if not _items:
        response.json({"error": "no items yet"}, status=404)
        return
    response.json(_items[max(_items, key=int)])


def show_item(request, response, next):
    response.json(request.state["item"])


async def create_item(request, response, next):
    payload = await request.json()
    item_id = str(next_id())
    _items[item_id] = {"id": item_id, **payload}
    response.set_header("Location", f"/items/{item_id}")
    response.json(_items[item_id], status=201)


async def update_item(request, response, next):
    request.state["item"].update(await request.json())
    response.json(request.state["item"])


def delete_item(request, response, next):
    del _items[request.state["item"]["id"]]
    response.set_status(204).end()


def next_id() -> int:
    return next(_ids)


app.get("/", index)
app.get("/items", list_items)
# Registered before /items/:id so it is tried first
app.get("/items/newest", newest_item)
app.get("/items/:id", load_item, show_item)
app.post("/items", require_token, create_item)
app.patch("/items/:id", require_token, load_item, update_item)
app.delete("/items/:id", require_token, load_item, delete_item)


if __name__ == "__main__":
    app.listen(3000, lambda: print("items demo on http://127.0.0.1:3000"))
