# easyguide/diagnostics.py
from flask import Response

ROUTE_METHODS = {"GET", "POST", "PUT", "DELETE", "PATCH"}


def route_map(app) -> list[str]:
    lines = []
    for rule in sorted(app.url_map.iter_rules(), key=lambda r: r.rule):
        methods = ",".join(sorted(m for m in rule.methods if m in ROUTE_METHODS))
        lines.append(f"{rule.rule:45s} -> {rule.endpoint} [{methods}]")
    return lines


def register_diagnostics(app):
    # Diagnostics: list all routes
    @app.get("/__routes")
    def __routes():
        return Response("\n".join(route_map(app)), mimetype="text/plain")
