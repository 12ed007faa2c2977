"""runfile package: run line-oriented command pipelines from a script file."""

from .config import Config
from .environment import Environment
from .exceptions import ArgumentError, ExecutionError, ParseError, RunfileError, ScriptNotFound
from .parser import Cmd, Comment, Item, ItemParser, Pipeline
from .pipeline import ExecutionContext, PipelineExecutor
from .runner import ScriptRunner
from .words import SplitWords, split_words

__all__ = [
    "ScriptRunner",
    "ItemParser",
    "PipelineExecutor",
    "ExecutionContext",
    "Environment",
    "Config",
    "Cmd",
    "Comment",
    "Pipeline",
    "Item",
    "SplitWords",
    "split_words",
    "RunfileError",
    "ArgumentError",
    "ParseError",
    "ExecutionError",
    "ScriptNotFound",
]
