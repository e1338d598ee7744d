"""Invocation template built from positional codec parameters."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class ParserStage(Enum):
    EXPECT_EXTENSION = 0
    EXPECT_COMPRESS_CMD = 1
    EXPECT_DECOMPRESS_CMD = 2
    COLLECTING_EXTRA_ARGS = 3


@dataclass
class CodecInvocationTemplate:
    """How to call an external tool: container extension, commands, fixed arguments."""

    extension: str = ""
    compress_command: str = ""
    decompress_command: str = ""
    compress_args: List[str] = field(default_factory=list)
    description: str = ""

    def compress_argv(self, input_path: str, output_path: str) -> List[str]:
        return [*self.compress_args, input_path, output_path]

    def decompress_argv(self, input_path: str, output_path: str) -> List[str]:
        return [input_path, output_path]
