# -*- coding: utf-8 -*-

__license__ = "MIT"
__version__ = "1.0.0"
__status__ = "Development"
