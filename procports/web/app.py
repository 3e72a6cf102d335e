from __future__ import annotations
from dataclasses import replace
from flask import Flask, Response, jsonify, request, current_app

from ..config import CFG, ConfigError, parse_bool, parse_port, validate_sort_key
from ..collectors import collect
from ..query import query
from ..render import render_json
from .ui import render_html

def cfg_from_request(cfg: CFG) -> CFG:
    """Per-request overrides of the served defaults via query parameters."""
    args = request.args
    out = replace(cfg)
    if "port" in args:
        out.port = parse_port(args["port"] or None)
    if "name" in args:
        out.name = args["name"] or None
    if "sort" in args:
        out.sort_key = validate_sort_key(args["sort"])
    if "reverse" in args:
        out.reverse = parse_bool(args["reverse"])
    if "all" in args:
        out.show_all = parse_bool(args["all"])
    return out

def snapshot(cfg: CFG):
    records = collect(cfg.listen_only, cfg.proc_root)
    result = query(records, cfg)
    current_app.logger.info("snapshot: %d socket(s), %d after filter", len(records), len(result))
    return result

def create_app(cfg: CFG) -> Flask:
    app = Flask(__name__)

    @app.errorhandler(ConfigError)
    def bad_config(e):
        current_app.logger.warning("rejected request %s: %s", request.full_path, e)
        return jsonify({"error": str(e)}), 400

    @app.get("/")
    def index():
        req_cfg = cfg_from_request(cfg)
        return Response(render_html(snapshot(req_cfg), req_cfg.show_all), mimetype="text/html")

    @app.get("/api/ports")
    def api_ports():
        return Response(render_json(snapshot(cfg_from_request(cfg))), mimetype="application/json")

    return app
