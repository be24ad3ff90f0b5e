from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Largest value an Integer primary key can hold on Postgres
MAX_ID = 2**31 - 1
