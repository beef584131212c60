"""Contains the name for the logger of finitediffkit modules.

``finitediffkit`` uses a simple logging system based on the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library.
Logging messages are grouped in different levels:

* ``DEBUG``: Details about how a derivative or Jacobian is being assembled,
    e.g. a precomputed ``fx`` that the chosen scheme does not use.
* ``WARNING``: An indication that something unexpected
    happened which may require attention, e.g. non-finite Jacobian entries.

By default, only messages of level ``WARNING`` are displayed.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``finitediffkit.logger.finitediffkit_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "finitediffkit"
finitediffkit_logger = logging.getLogger(logger_name)
