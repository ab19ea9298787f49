# learnplaces/cli.py
import click
from flask import current_app
from learnplaces.extensions import db
from learnplaces.models.user import User


def register_cli(app):
    @app.cli.command("create-db")
    def create_db():
        """Create all tables (development only, use migrations otherwise)."""
        db.create_all()
        current_app.logger.info("Created tables for %s", current_app.config["SQLALCHEMY_DATABASE_URI"])

    @app.cli.command("create-user")
    @click.argument("email")
    @click.password_option()
    @click.option("--role", type=click.Choice(["admin", "editor", "user"]), default="editor")
    def create_user(email, password, role):
        if User.query.filter_by(email=email).first():
            raise click.ClickException(f"User {email} already exists")

        user = User()
        user.email = email
        user.role = role
        user.set_password(password)

        db.session.add(user)
        db.session.commit()
        current_app.logger.info("Created %s user %s", role, email)
