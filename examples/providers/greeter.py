"""Minimal example provider: a module that greets callers.

Demonstrates the module-level provider interface:
- name and version attributes
- an async setup(environment, registry) hook
- an endpoints list
"""

name = "greeter"
version = "1.0.0"

_settings = {"greeting": "Hello"}


async def setup(environment, registry):
    """Pick up the greeting from the shared environment extras."""
    _settings["greeting"] = environment.extras.get("greeting", "Hello")
    environment.log(f"greeter ready with greeting '{_settings['greeting']}'", "debug")


def greet(request):
    """Greet the caller named in the request body."""
    who = (request.body or {}).get("name", "world")
    return {"message": f"{_settings['greeting']}, {who}!"}


endpoints = [
    {
        "route": "/hello",
        "method": "post",
        "handler": greet,
        "openapi": {"post": {"summary": "Greet a caller"}},
    },
]
