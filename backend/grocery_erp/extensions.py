# Overview: Flask extension instances shared by models, services and routes.

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
