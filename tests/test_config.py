import argparse
import json

import pytest

from procports.config import (CFG, ConfigError, build_cfg, init_cfg_from_args,
                              load_config_file, parse_listen, parse_port, validate_sort_key)

def ns(**kw):
    base = dict(config=None, all=None, port=None, name=None, sort=None, reverse=None,
                json=None, proc_root=None, serve=None, listen=None)
    base.update(kw)
    return argparse.Namespace(**base)

def test_defaults():
    cfg = init_cfg_from_args(ns())
    assert cfg == CFG()
    assert cfg.listen_only

def test_cli_values():
    cfg = init_cfg_from_args(ns(all=True, port="22", name="ssh", sort="pid", reverse=True, json=True))
    assert (cfg.show_all, cfg.port, cfg.name, cfg.sort_key, cfg.reverse, cfg.json_output) == \
        (True, 22, "ssh", "pid", True, True)
    assert not cfg.listen_only

@pytest.mark.parametrize("bad", ["ssh", "-1", "65536", "2.5", "", 22.9, True, [22]])
def test_bad_port(bad):
    with pytest.raises(ConfigError):
        parse_port(bad)

def test_port_bounds():
    assert parse_port("0") == 0
    assert parse_port(65535) == 65535
    assert parse_port(None) is None

@pytest.mark.parametrize("value", ["22.9", "true", "\"\""])
def test_yaml_port_must_be_an_integer(tmp_path, value):
    p = tmp_path / "c.yaml"
    p.write_text(f"port: {value}\n")
    with pytest.raises(ConfigError):
        init_cfg_from_args(ns(config=str(p)))

def test_yaml_integer_port(tmp_path):
    p = tmp_path / "c.yaml"
    p.write_text("port: 443\n")
    assert init_cfg_from_args(ns(config=str(p))).port == 443

def test_empty_cli_port_rejected():
    with pytest.raises(ConfigError):
        init_cfg_from_args(ns(port=""))

def test_bad_sort_key():
    with pytest.raises(ConfigError):
        validate_sort_key("name")

def test_parse_listen():
    assert parse_listen("127.0.0.1:8080") == ("127.0.0.1", 8080)
    assert parse_listen("[::1]:9000") == ("::1", 9000)
    with pytest.raises(ConfigError):
        parse_listen("8080")

def test_yaml_file_then_cli_override(tmp_path):
    p = tmp_path / "procports.yaml"
    p.write_text("sort_key: proto\nreverse: true\nname: nginx\n")
    cfg = init_cfg_from_args(ns(config=str(p), name="sshd"))
    assert cfg.sort_key == "proto"
    assert cfg.reverse is True
    assert cfg.name == "sshd"

def test_json_file(tmp_path):
    p = tmp_path / "procports.json"
    p.write_text(json.dumps({"port": 443, "show_all": True}))
    assert load_config_file(str(p)) == {"port": 443, "show_all": True}

def test_file_with_bad_sort_key(tmp_path):
    p = tmp_path / "c.yml"
    p.write_text("sort_key: inode\n")
    with pytest.raises(ConfigError):
        init_cfg_from_args(ns(config=str(p)))

def test_file_unknown_key(tmp_path):
    p = tmp_path / "c.yml"
    p.write_text("colour: blue\n")
    with pytest.raises(ConfigError):
        load_config_file(str(p))

def test_file_not_mapping(tmp_path):
    p = tmp_path / "c.json"
    p.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_config_file(str(p))

def test_file_malformed(tmp_path):
    p = tmp_path / "c.json"
    p.write_text("{nope")
    with pytest.raises(ConfigError):
        load_config_file(str(p))

def test_file_missing(tmp_path):
    with pytest.raises(ConfigError):
        load_config_file(str(tmp_path / "absent.yaml"))

def test_bool_strings():
    assert build_cfg({"reverse": "yes", "show_all": "0"}).reverse is True
    with pytest.raises(ConfigError):
        build_cfg({"reverse": "maybe"})
