from clubdesk import create_app
from flask.cli import with_appcontext
from flask_migrate import upgrade, migrate, init
import click

app = create_app()

@app.cli.command("db-init")
@with_appcontext
def db_init():
    """Creates the migrations directory for the clubdesk schema"""
    init()
    click.echo("Migrations directory created; run db-migrate next")

@app.cli.command("db-migrate")
@click.option("-m", "--message", default=None, help="Revision message, e.g. 'add events'")
@with_appcontext
def db_migrate(message):
    """Autogenerates a revision from the current models"""
    migrate(message=message)

@app.cli.command("db-upgrade")
@click.option("--revision", default="head", show_default=True)
@with_appcontext
def db_upgrade(revision):
    """Applies migrations up to REVISION"""
    upgrade(revision=revision)
    click.echo(f"Database upgraded to {revision}")

@app.cli.command("seed")
@with_appcontext
def seed():
    """Loads the demo roster"""
    from clubdesk.seed import seed_data
    counts = seed_data()
    click.echo(f"Seeded {counts['students']} students, {counts['instructors']} instructors, {counts['attendance']} attendance rows")

@app.cli.command("finalize-month")
@click.argument("month")
@with_appcontext
def finalize_month(month):
    """Finalizes attendance for MONTH (YYYY-MM)"""
    from clubdesk.services import finalization
    from clubdesk.utils.audit import log_event
    try:
        already = finalization.is_finalized(month)
        status = finalization.finalize(month)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="MONTH")
    if not already:
        log_event("MONTH_FINALIZED", month=status["month"], description="finalized from CLI")
    click.echo(f"{status['month']} finalized at {status['finalized_at']}")
