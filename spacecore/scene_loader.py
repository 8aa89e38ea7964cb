#!/usr/bin/env python3
"""
Scene JSON loading utilities.

A scene is a JSON array of body records, optionally preceded by a settings record.
Scenes shipped with the package live in spacecore/scenes/*.json and are addressed by name
without the extension; any other path to a .json file works as well.

Schema
======
[
  {"settings": true, "tracelife": 6},   # optional, must come first
  {
    "name": "E",              # glyph drawn for the body
    "colour": 33,             # optional xterm-256 index, default 226
    "mass": 5.972e24,         # kg, > 0
    "x": 0, "y": 0,           # m
    "vx": 0, "vy": 0,         # m/s
    "fixed": true             # optional, default false
  }
]

Any problem with a scene raises SceneError: a bad scene must stop the program before
the simulation starts.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import List, Tuple
from .camera import find_extent
from .constants import DEFAULT_COLOUR, DEFAULT_TRACE_LIFE, LOGGER_NAME
from .data_models import Body
from .utils import try_float
from .vector_utils import clamp

SCENES_DIR = os.path.join(os.path.dirname(__file__), "scenes")

logger = logging.getLogger(LOGGER_NAME)


class SceneError(Exception):
  """The scene is missing or cannot be turned into bodies."""


@dataclass
class SceneSettings:
  trace_life: float = DEFAULT_TRACE_LIFE


def _read_json(path: str):
  try:
    with open(path, "r", encoding="utf-8") as f:
      return json.load(f)
  except FileNotFoundError:
    raise SceneError(f"scene file not found: {path}") from None
  except (OSError, json.JSONDecodeError) as e:
    raise SceneError(f"cannot read scene {path}: {e}") from e


def _coerce_colour(c) -> int:
  if c is None:
    return DEFAULT_COLOUR
  f = try_float(c)
  if f is None:
    raise SceneError(f"colour must be an xterm-256 index, got {c!r}")
  return int(clamp(int(f), 0, 255))


def _number(record: dict, key: str, index: int) -> float:
  if key not in record:
    raise SceneError(f"body #{index}: missing field {key!r}")
  f = try_float(record[key])
  if f is None:
    raise SceneError(f"body #{index}: field {key!r} is not a number: {record[key]!r}")
  return f


def parse_body(record, index: int = 0) -> Body:
  """Build a Body from one scene record."""
  if not isinstance(record, dict):
    raise SceneError(f"body #{index}: expected an object, got {type(record).__name__}")
  name = record.get("name")
  if not isinstance(name, str) or not name:
    raise SceneError(f"body #{index}: 'name' must be a non-empty string")
  mass = _number(record, "mass", index)
  if mass <= 0:
    raise SceneError(f"body #{index} ({name}): mass must be > 0, got {mass}")
  return Body(
    name=name,
    mass=mass,
    position=(_number(record, "x", index), _number(record, "y", index)),
    velocity=(_number(record, "vx", index), _number(record, "vy", index)),
    colour=_coerce_colour(record.get("colour")),
    fixed=bool(record.get("fixed", False)),
  )


def parse_scene(data) -> Tuple[List[Body], SceneSettings]:
  """Turn decoded scene JSON into (bodies, settings)."""
  if not isinstance(data, list):
    raise SceneError("scene must be a JSON array of bodies")
  records = list(data)
  settings = SceneSettings()
  if records and isinstance(records[0], dict) and records[0].get("settings"):
    s = records.pop(0)
    if "tracelife" in s:
      life = try_float(s["tracelife"])
      if life is None or life <= 0:
        raise SceneError(f"settings: tracelife must be a positive number, got {s['tracelife']!r}")
      settings.trace_life = life

  bodies = [parse_body(r, i) for i, r in enumerate(records)]
  if not bodies:
    raise SceneError("scene contains no bodies")
  if find_extent(bodies) <= 0:
    raise SceneError("scene has no extent: every body starts at the origin")
  return bodies, settings


def list_scenes(scenes_dir: str = SCENES_DIR) -> List[str]:
  """Return the names of the scenes available in scenes_dir."""
  if not os.path.isdir(scenes_dir):
    return []
  return sorted(os.path.splitext(fn)[0] for fn in os.listdir(scenes_dir)
                if fn.lower().endswith(".json"))


def scene_path(name: str, scenes_dir: str = SCENES_DIR) -> str:
  if name.lower().endswith(".json") or os.sep in name:
    return name
  return os.path.join(scenes_dir, name + ".json")


def load_scene(name: str, scenes_dir: str = SCENES_DIR) -> Tuple[List[Body], SceneSettings]:
  """
  Load a scene by name (from scenes_dir) or by path.
  Returns (bodies, settings)
  """
  path = scene_path(name, scenes_dir)
  bodies, settings = parse_scene(_read_json(path))
  logger.info("Loaded scene %s: %d bodies, trace life %.1fs", path, len(bodies), settings.trace_life)
  return bodies, settings
