"""
Attribute-style access over opaque API JSON
"""


class Resource:
    """Read-only view of one JSON object. Missing fields read as None."""

    def __init__(self, json: dict):
        self._json = json

    def __getattr__(self, attr):
        if attr.startswith('_'):
            raise AttributeError(attr)
        return self._json.get(attr)

    def __getitem__(self, key):
        return self._json[key]

    def __eq__(self, other):
        if isinstance(other, Resource):
            return self._json == other._json
        return NotImplemented

    def __repr__(self):
        return f"{type(self).__name__}(id={self._json.get('id')!r})"

    def to_dict(self) -> dict:
        return dict(self._json)


class Newscast(Resource):
    pass
