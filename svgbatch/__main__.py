import sys

from svgbatch.generate_batch import main

sys.exit(main())
