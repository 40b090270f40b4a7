##
# Logging setup for the FRU daemon.
#
# Every module logs through its own logging.getLogger(__name__); the daemon
# instantiates one MainLogger at startup, which configures the root logger
# with a stdout handler and (optionally) a file handler. Under systemd the
# stdout stream ends up in the journal, so the logfile is off by default.
#
# @note on Windows, define PYTHONUTF8 environment variable to avoid error messages
#       when log messages contain Unicode (default stdout/stderr streams are cp1252)

import os
import sys
import logging

from . import utils

# ##############################################################################
#                                                                              #
#                    Semi-static, module-level functions                       #
#                                                                              #
# ##############################################################################

explicit_path = None

def set_location(path):
    global explicit_path
    explicit_path = path

## @returns the active logfile pathname, or None when only logging to stdout
def get_location():
    return explicit_path

def log_file_created():
    pathname = get_location()
    return pathname is not None and os.path.exists(pathname)

# ##############################################################################
#                                                                              #
#                                MainLogger                                    #
#                                                                              #
# ##############################################################################

class MainLogger(object):
    FORMAT = u'%(asctime)s [0x%(thread)08x] %(name)s %(levelname)-8s %(message)s'

    ## bytes kept from a previous session's logfile when append_arg is "limit"
    APPEND_LIMIT = 2 * 1024 * 1024

    def __init__(self,
            log_level=logging.DEBUG,
            enable_stdout=True,
            logfile=None,
            append_arg="True",
            stream=None):
        self.log_level     = log_level
        self.enable_stdout = enable_stdout
        self.logfile       = logfile
        self.stream        = sys.stdout if stream is None else stream
        self.handlers      = []

        if self.logfile is not None:
            set_location(self.logfile)

        # append file size limits are enforced upon program restart
        if str(append_arg).lower() == "limit":
            append = MainLogger.APPEND_LIMIT
        else:
            append = utils.to_bool(append_arg)

        root_log = logging.getLogger()
        self.log_configurer(self.logfile, append)
        root_log.setLevel(self.log_level)
        root_log.debug("Top level log configuration (%d handlers, get_location %s)", len(root_log.handlers), get_location())

    ## Setup file handler and stdout stream handler on the root logger.
    def log_configurer(self, logfile=None, append=False):
        root_logger = logging.getLogger()
        formatter = logging.Formatter(self.FORMAT)

        if logfile is not None:
            try:
                if type(append) == int:
                    utils.resize_file(path=logfile, nbytes=append)
            except OSError:
                print("Unable to truncate log file.", file=sys.stderr)

            fh = logging.FileHandler(logfile, mode='a' if append else 'w', encoding='utf-8')
            fh.setFormatter(formatter)
            root_logger.addHandler(fh)
            self.handlers.append(fh)

        if self.enable_stdout:
            stream_handler = logging.StreamHandler(self.stream)
            stream_handler.setFormatter(formatter)
            root_logger.addHandler(stream_handler)
            self.handlers.append(stream_handler)

        self.root = root_logger

    ## remove only the handlers this logger added
    def close(self):
        root_log = logging.getLogger()
        for handler in self.handlers:
            handler.close()
            root_log.removeHandler(handler)
        self.handlers = []
