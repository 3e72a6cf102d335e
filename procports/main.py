from __future__ import annotations
import argparse, logging, sys
from .config import SORT_KEYS, DEFAULT_LISTEN, ConfigError, init_cfg_from_args, parse_listen
from .collectors import collect
from .query import query
from .render import render

log = logging.getLogger("procports")

EXIT_OK = 0
EXIT_BAD_CONFIG = 2

def parse_args(argv=None):
    ap = argparse.ArgumentParser(
        prog='procports',
        description='List listening sockets and the processes that own them')
    ap.add_argument('-a', '--all', action='store_true', default=None, help='show sockets in every state, not only LISTEN')
    ap.add_argument('-p', '--port', type=str, default=None, help='only show this port')
    ap.add_argument('-n', '--name', type=str, default=None, help='only show sockets whose owner name contains this (case-insensitive)')
    ap.add_argument('-s', '--sort', type=str, default=None, help=f"sort by one of: {', '.join(SORT_KEYS)} (default: port)")
    ap.add_argument('-r', '--reverse', action='store_true', default=None, help='reverse the sort order')
    ap.add_argument('-j', '--json', action='store_true', default=None, help='print JSON instead of a table')
    ap.add_argument('--config', type=str, default=None, help='YAML/JSON file with defaults for the options above')
    ap.add_argument('--proc-root', type=str, default=None, help='procfs mount point (default: /proc)')
    ap.add_argument('--serve', action='store_true', default=None, help='serve the report over HTTP instead of printing it')
    ap.add_argument('--listen', type=str, default=None, help=f'HOST:PORT for --serve (default: {DEFAULT_LISTEN})')
    ap.add_argument('-v', '--verbose', action='store_true', help='debug logging on stderr')
    return ap.parse_args(argv)

def setup_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format='[%(levelname)s] %(message)s', stream=sys.stderr)

def serve(cfg) -> None:
    from .web import create_app
    host, port = parse_listen(cfg.listen)
    app = create_app(cfg)
    print(f"[*] Serving on http://{host}:{port}", file=sys.stderr)
    app.run(host=host, port=port, debug=False, use_reloader=False)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)
    try:
        cfg = init_cfg_from_args(args)
    except ConfigError as e:
        print(f"[error] {e}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    if cfg.serve:
        serve(cfg)
        return EXIT_OK

    records = collect(cfg.listen_only, cfg.proc_root)
    result = query(records, cfg)
    log.debug("%d socket(s) collected, %d shown", len(records), len(result))
    print(render(result, cfg.json_output))
    return EXIT_OK

if __name__ == '__main__':
    sys.exit(main())
