# yomilex/__main__.py
import sys

from yomilex.main import main

sys.exit(main())
