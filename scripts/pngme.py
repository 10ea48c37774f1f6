#!/usr/bin/env python3
'''
Hide, read and remove messages inside PNG files.

 $ pngme.py encode image.png "meet me at midnight"
 $ pngme.py decode image.png abCD
 $ pngme.py print image.png
 $ pngme.py remove image.png abCD

Set the DEBUG environment variable to see what is going on.
'''
import sys

from pngme.commands import main


if __name__ == '__main__':
    sys.exit(main())
