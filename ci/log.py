from copy import copy
import logging
import sys

import termcolor


class CCFormatter(logging.Formatter):
    level_colors = {
        logging.DEBUG: 'blue',
        logging.INFO: 'green',
        logging.WARNING: 'yellow',
        logging.ERROR: 'red',
        logging.CRITICAL: 'red',
    }

    def __init__(self, *args, colored: bool=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.colored = sys.stderr.isatty() if colored is None else colored

    def color_level_name(self, level_name: str, level_number: int) -> str:
        if not (color := self.level_colors.get(level_number)):
            return level_name

        return termcolor.colored(level_name, color, attrs=['bold'])

    def formatMessage(self, record):
        record_copy = copy(record)
        levelname = record_copy.levelname
        if self.colored:
            levelname = self.color_level_name(levelname, record_copy.levelno)
        record_copy.__dict__['levelprefix'] = levelname
        return super().formatMessage(record_copy)


def default_fmt_string() -> str:
    return '%(asctime)s [%(levelprefix)s] %(name)s: %(message)s'


def configure_default_logging(
    stdout_level=None,
    force=True,
    custom_format_string: str = '',
):
    if not stdout_level:
        stdout_level = logging.INFO

    # make sure to have a clean root logger (in case setup is called multiple times)
    if force:
        for h in list(logging.root.handlers):
            logging.root.removeHandler(h)
            h.close()

    sh = logging.StreamHandler(stream=sys.stderr)
    sh.setLevel(stdout_level)
    sh.setFormatter(CCFormatter(fmt=custom_format_string or default_fmt_string()))

    logging.root.addHandler(hdlr=sh)
    logging.root.setLevel(level=stdout_level)

    # GitPython logs every git invocation on debug
    logging.getLogger('git').setLevel(logging.WARNING)
