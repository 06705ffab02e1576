import sys

from .audiofreq import main

sys.exit(main())
