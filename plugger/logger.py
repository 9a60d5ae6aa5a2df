# Copyright 2026 The plugger authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


r"""
The plugger.logger module provides the logging setup for front ends.
It sets up the console and (optionally) a log file.  For early debugging,
it checks the PLUGGER_DEBUG, PLUGGER_LOG, and PLUGGER_LOG_LEVEL
environment variables.
"""

import argparse
import contextlib
import logging
import os
import sys

from plugger import PLUGGER_VERSION


def version_string():
    args = (PLUGGER_VERSION, sys.version.split()[0])
    return "plugger %s (Python %s)" % args


class VersionAction(argparse.Action):
    def __call__(self, parser, namespace, value, option_string=None):
        print(version_string())
        sys.exit(0)


def add_version_argument(parser):
    parser.add_argument("--version", action=VersionAction, nargs=0,
                        help="Print version and exit")


#: Map human-readable logging levels to their internal values.
log_level_names = {"critical": logging.CRITICAL,
                   "error":    logging.ERROR,
                   "warn":     logging.WARNING,
                   "info":     logging.INFO,
                   "debug":    logging.DEBUG,
                   }


def _level(value, default):
    """Accept a level number or name, falling back to @default"""
    try:
        return int(value)
    except ValueError:
        return log_level_names.get(value, default)


class Logger(object):

    log_format = '[%(asctime)s] %(name)s - %(levelname)s: %(message)s'

    def __init__(self):
        # create root logger
        self.logger = logging.getLogger()
        self.logger.setLevel(logging.DEBUG)

        self.LOG = logging.getLogger(__name__)

        # Set PLUGGER_DEBUG in environment for early console debugging.
        # It can be a number or a name; otherwise, level is set to 'debug'.
        debug = os.getenv("PLUGGER_DEBUG")
        self.early_level = logging.WARNING
        if debug:
            self.early_level = _level(debug, logging.DEBUG)

        self.console = logging.StreamHandler()
        self.console_level = self.early_level
        self.console.setLevel(self.early_level)
        self.console.setFormatter(logging.Formatter('%(levelname)s: '
                                                    '%(message)s'))
        self.logger.addHandler(self.console)

        # Set PLUGGER_LOG in environment to the name of log file.
        logname = os.getenv("PLUGGER_LOG")
        self.logfile = None
        if logname is not None:
            self.create_log_file(logname)
            level = os.getenv("PLUGGER_LOG_LEVEL")
            if level is not None:
                self.set_log_level(_level(level, logging.DEBUG))
            else:
                self.set_log_level(logging.DEBUG)

        if self.early_level <= logging.DEBUG:
            self.LOG.debug(version_string())

    def create_log_file(self, name):
        if self.logfile is None:
            self.logname = name
            # always truncate the log file
            with open(name, "w"):
                pass
            self.logfile = logging.FileHandler(name)
            self.logfile.setFormatter(logging.Formatter(self.log_format))
            self.logger.addHandler(self.logfile)
        else:
            self.logger.error("already logging to " + self.logname)

    def set_verbosity(self, level):
        self.LOG.debug("verbosity=%d", level)
        if level > logging.CRITICAL:
            level = logging.CRITICAL
        self.console_level = level
        self.console.setLevel(level)

    def set_log_level(self, level):
        self.LOG.debug("log level=%d", level)
        if level > logging.CRITICAL:
            level = logging.CRITICAL
        self.logfile.setLevel(level)

    instance: object


Logger.instance = Logger()


def is_visible(level):
    """Returns True if a message at level will be shown on the console"""
    return level >= Logger.instance.console_level


def add_arguments(parser):
    parser.add_argument("-q", "--quiet", action="count", default=0,
                        help="Decrease verbosity")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity")
    parser.add_argument("--log", dest="log_file", action="store", default=0,
                        help="Log messages to a file")
    parser.add_argument("--log-level", action="store", default="debug",
                        help="Log file verbosity (critical, error, warn, " +
                        "info, debug).  Defaults to 'debug'.")


def handle_options(options):
    logger = Logger.instance

    if options.verbose or options.quiet:
        logger.set_verbosity(30 + 10 * (options.quiet - options.verbose))

    if options.log_file:
        logger.create_log_file(options.log_file)
        logger.set_log_level(_level(options.log_level, logging.DEBUG))

    if logger.early_level > logging.DEBUG:
        logger.LOG.debug(version_string())


class LookbackHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self._history = []

    def emit(self, record):
        self._history.append(record)

    def get_history(self):
        return self._history


@contextlib.contextmanager
def log_history(level, root=None):
    root = logging.getLogger(root)
    handler = LookbackHandler()
    handler.setLevel(level)
    try:
        root.addHandler(handler)
        yield handler
    finally:
        root.removeHandler(handler)
