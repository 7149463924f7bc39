# -*- coding: utf-8 -*-
from esplora_batch.version import __version__

__all__ = ["__version__"]
