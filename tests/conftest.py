from config import ApplicationConfig

# Minimum bcrypt cost keeps the suite fast; production reads BCRYPT_ROUNDS from env.yaml
ApplicationConfig.BCRYPT_ROUNDS = 4
