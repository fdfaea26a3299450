import logging
import os
import uuid
from concurrent_log_handler import ConcurrentRotatingFileHandler
from dotenv import load_dotenv

load_dotenv()


def setup_logging():
    logger = logging.getLogger("tcc_api_log") # create logger
    if not logger.hasHandlers(): # check if handlers already exist
        logger.setLevel(logging.INFO) # set log level

        # create log directory if it doesn't exist
        log_dir = os.getenv("LOG_DIR", "logs")
        os.makedirs(log_dir, exist_ok=True)

        # create a file handler
        file_handler = ConcurrentRotatingFileHandler(
            os.path.join(log_dir, "tcc_api.log"),
            maxBytes=10000, # 10KB
            backupCount=50
        )
        file_handler.setLevel(logging.INFO)

        #  create a console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)

        # create a formatter
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s - %(pathname)s - %(filename)s - %(lineno)d" , datefmt="%Y-%m-%d %H:%M:%S")
        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        #  add the handlers to the logger
        logger.addHandler(file_handler)
        logger.addHandler(console_handler)
    return logger


def create_unique_id():
    return str(uuid.uuid4())


def create_signature_suffix(length: int = 16):
    return uuid.uuid4().hex[:length]
