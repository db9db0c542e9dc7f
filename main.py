#!/usr/bin/env python3
from gearspeed.cli import main

if __name__ == "__main__":
    main()
