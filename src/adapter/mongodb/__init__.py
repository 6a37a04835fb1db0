"""MongoDB adapters. Collection names shared by the repositories."""

USERS_COLLECTION_NAME = 'users'
WORKOUTS_COLLECTION_NAME = 'workouts'
