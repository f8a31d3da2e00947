# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging


def init_logging():
    """Diagnostics of the tool itself, separate from the audit log of the run.

    Only warnings reach the console; the audit log owns stdout.
    """
    logging.getLogger().setLevel(logging.DEBUG)
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.WARNING)
    stream_handler.setFormatter(logging.Formatter('%(name)s %(levelname)s %(message)s'))
    logging.getLogger().addHandler(stream_handler)
