from flask_sqlalchemy import SQLAlchemy
from parkease.recognizer import PlateRecognizer

db = SQLAlchemy()
recognizer = PlateRecognizer()
