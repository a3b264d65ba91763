import sys

from weekend_raytracer.main import main

sys.exit(main())
