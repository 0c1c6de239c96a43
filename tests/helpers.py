"""
Shared test values for the diary vault tests.
"""
PASSWORD = "correct horse battery staple"
WRONG_PASSWORD = "wrong password"
TEST_SALT = bytes(range(16))
