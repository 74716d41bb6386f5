"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ExtDtsConfig


def load_config(cli_path: str | None = None) -> ExtDtsConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./extdts.yaml"),
        Path.home() / ".extdts" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return ExtDtsConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return ExtDtsConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `extdts config init`
DEFAULT_CONFIG_TEMPLATE = """\
# extdts.yaml

# Ext JS distributions built by `extdts generate`
versions:
  - name: "ExtJS-4.2.1.883"
    folder: "ext-4.2.1.883"
    url: "http://cdn.sencha.com/ext/gpl/ext-4.2.1-gpl.zip"
    jsduck_extra: ""
    doc_url: "http://docs.sencha.com/extjs/4.2.5/#!/api/"

# JSDuck export loading
registry:
  class_prefix: "Ext."         # files outside this prefix are ignored
  detached_parents:            # classes exported with a bogus parent link
    - "Ext.Error"

# Declaration output
emitter:
  doc_url: "http://docs.sencha.com/extjs/4.2.5/#!/api/"
  alias_prefix: "__"           # prefix for shadowed builtin aliases

output:
  base_dir: "build"

# External tools
toolchain:
  jsduck: "jsduck"
  tsc_command: ["npx", "tsc", "--noEmit"]
  tsfmt_command: ["npx", "tsfmt", "-r"]
  format_output: true
  timeout: 600
  download_timeout: 120

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
