import bcrypt

PASSWORD = "SecurePass123!"

# Low cost factor keeps fixture hashing fast; verification reads the cost from the hash
FIXTURE_PASSWORD_HASH = bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode()
