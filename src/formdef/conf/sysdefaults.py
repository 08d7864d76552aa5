LOG_LEVEL = "info"
LOG_FORMATTER_FULL = (
    "[%(asctime)-15s] [{hostname}] "
    "%(process)3d %(levelname)-6s "
    "[%(name)16.16s - %(filename)16.16s:%(lineno)-4d] "
    "%(message)s"
)
LOG_FORMATTER_SHORT = (
    "[%(asctime)-8s] "
    "[%(name)16.16s - %(filename)16.16s:%(lineno)-4d]%(levelname)6s "
    "%(message)s"
)
LOG_DATEFMT = "%H:%M:%S"
LOG_FORMATTER = LOG_FORMATTER_SHORT
LOG_OUTPUT = None
LOG_COLORED = False

# Print module configuration. Accept the name of a module. E.g. "formdef"
DEBUG_MODULE_CONFIG = None
