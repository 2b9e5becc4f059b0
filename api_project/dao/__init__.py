# This file marks the DAO package for data-access objects built on the database client.
# DAOs turn generic rows into domain records and own the SQL text for their tables.
