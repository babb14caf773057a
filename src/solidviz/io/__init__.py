"""Export of solidviz geometry."""

from .stl import write_stl
from .scene_json import scene_to_dict, write_scene_json

__all__ = ['write_stl', 'scene_to_dict', 'write_scene_json']
