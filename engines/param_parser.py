"""Positional parameter parsing for external-tool codecs."""

from typing import Callable

from models.invocation_template import CodecInvocationTemplate, ParserStage


def _strip_dashes(param: str) -> str:
    if len(param) > 2 and param.startswith('--'):
        return param[2:]
    if len(param) > 2 and param.startswith('-'):
        return param[1:]
    return param


class InvocationTemplateParser:
    """Consumes extension, compress command, decompress command, then extra arguments.

    Extra arguments of the form '-d<value>' are also handed to forward_generic
    without the leading dash, so 'd<value>' sets the codec's distance knob
    while the tool still receives the flag verbatim.
    """

    def __init__(self, forward_generic: Callable[[str], None]):
        self.stage = ParserStage.EXPECT_EXTENSION
        self.template = CodecInvocationTemplate()
        self._forward_generic = forward_generic

    @property
    def is_configured(self) -> bool:
        return self.stage is ParserStage.COLLECTING_EXTRA_ARGS

    def parse_param(self, param: str) -> None:
        template = self.template

        if self.stage is ParserStage.EXPECT_EXTENSION:
            template.extension = param
            template.description = param
            self.stage = ParserStage.EXPECT_COMPRESS_CMD

        elif self.stage is ParserStage.EXPECT_COMPRESS_CMD:
            template.compress_command = param
            template.description += ":" + param.rsplit('/', 1)[-1]
            self.stage = ParserStage.EXPECT_DECOMPRESS_CMD

        elif self.stage is ParserStage.EXPECT_DECOMPRESS_CMD:
            template.decompress_command = param
            self.stage = ParserStage.COLLECTING_EXTRA_ARGS

        else:
            if len(param) > 2 and param.startswith('-d'):
                self._forward_generic(param[1:])
            template.compress_args.append(param)
            template.description += ":" + _strip_dashes(param)
