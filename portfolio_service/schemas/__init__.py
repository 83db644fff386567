# schemas/__init__.py

from .auth_schemas import *
from .common_schemas import *
from .crypto_schemas import *
from .news_schemas import *
from .pdf_schemas import *
from .portfolio_schemas import *
from .transliteration_schemas import *
