# env vars + constants
import os

PORT = int(os.getenv("PORT", "3000"))
HOST = os.getenv("HOST", "0.0.0.0")

VOTES_FILE = os.getenv("VOTES_FILE", os.path.join(os.getcwd(), "votes.json"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CHOICES = ("jajang", "jjamppong")
