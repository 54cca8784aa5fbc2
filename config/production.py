import os

from config.config import *  # noqa: F401,F403

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")  # noqa: F405
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")  # noqa: F405
