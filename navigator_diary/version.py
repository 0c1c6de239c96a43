"""Navigator Diary Meta information.
   Navigator Diary encrypts private diary entries on the client
   so that plaintext never leaves the user's device.
"""
__title__ = 'navigator_diary'
__description__ = (
   'Navigator Diary encrypts private diary entries on the client '
   'with a password-derived key.'
)
__version__ = '0.1.0'
__copyright__ = 'Copyright (c) 2023 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
__url__ = 'https://github.com/phenobarbital/navigator-diary'
