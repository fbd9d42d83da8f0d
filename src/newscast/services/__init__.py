"""Stateless, testable building blocks of the episode pipeline live here."""

from .assembler import AudioAssembler
from .episode_generator import EpisodeGenerator
from .script_structurer import ScriptStructurer
from .separator import SeparatorAsset
from .tts_generator import TTSGenerator
