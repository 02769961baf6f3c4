import click
from flask.cli import with_appcontext
from .extensions import db
from .models.user import User

@click.command("init-db")
@with_appcontext
def init_db():
    """Create all tables without running migrations."""
    db.create_all()
    click.echo("Initialized the database")

@click.command("create-admin")
@click.argument("username")
@click.password_option()
@with_appcontext
def create_admin(username, password):
    """Create an admin account, or promote an existing one."""
    u = User.query.filter_by(username=username).one_or_none()
    if u is None:
        u = User(username=username, role="admin")
        db.session.add(u)
        click.echo(f"Created admin user '{username}'")
    else:
        u.role = "admin"
        click.echo(f"Promoted '{username}' to admin")
    u.set_password(password)
    db.session.commit()

def register_commands(app):
    app.cli.add_command(init_db)
    app.cli.add_command(create_admin)
