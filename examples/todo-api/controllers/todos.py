"""Todo items — full REST controller.

Served at ``/todos`` and ``/todos/:id``.
"""

import itertools

_ids = itertools.count(1)
TODOS: dict[str, dict] = {}


def exists(params, meta):
    return params.get("id") in TODOS


def read(params, meta):
    todo_id = params.get("id")
    if todo_id is None:
        return list(TODOS.values())
    return TODOS[todo_id]


def create(params, meta):
    todo_id = str(next(_ids))
    todo = {"id": todo_id, "title": params.get("title", ""), "done": False}
    TODOS[todo_id] = todo
    return todo


def update(params, meta):
    todo = {"id": params["id"], "title": params.get("title", ""), "done": bool(params.get("done"))}
    TODOS[params["id"]] = todo
    return todo


def partial(params, meta):
    todo = TODOS[params["id"]]
    for key in ("title", "done"):
        if key in params:
            todo[key] = params[key]
    return todo


def destroy(params, meta):
    return TODOS.pop(params["id"])
