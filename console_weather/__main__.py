import sys

from console_weather.cli import main

sys.exit(main())
