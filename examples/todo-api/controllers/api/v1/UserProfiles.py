"""User profiles — served at ``/api/v1/user-profiles``.

Uses the third ``context`` argument.  ``meta["user"]`` is filled only when
the hosting app installs middleware that sets ``chirp.context.g.user``;
``autoroute serve`` installs none, so ``GET /api/v1/user-profiles`` returns
an empty profile unless an id is given.
"""

PROFILES = {
    "ada": {"name": "Ada Lovelace", "role": "admin"},
}


async def read(params, meta, context):
    name = params.get("id") or meta.get("user")
    profile = PROFILES.get(name, {})
    return {"profile": profile, "url": context.original_url}


def _normalize(name):
    return name.strip().lower()


async def create(params, meta):
    name = _normalize(params["name"])
    PROFILES[name] = {"name": params["name"], "role": params.get("role", "member")}
    return PROFILES[name]
