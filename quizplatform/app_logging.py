import logging
from pythonjsonlogger.json import JsonFormatter

_HANDLER_NAME = 'quizplatform-json'


def setup_logger(level: str = 'INFO'):
    logger = logging.getLogger()
    logger.setLevel(level)
    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return
    logHandler = logging.StreamHandler()
    logHandler.set_name(_HANDLER_NAME)
    formatter = JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s',
                              rename_fields={'levelname': 'level', 'asctime': 'timestamp'})
    logHandler.setFormatter(formatter)
    logger.addHandler(logHandler)
