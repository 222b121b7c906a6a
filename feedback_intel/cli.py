import json

import click
from flask.cli import with_appcontext

from feedback_intel.extensions import db
from feedback_intel.models.feedback import Feedback
from feedback_intel.services import reporting
from feedback_intel.services.loader import load_records
from feedback_intel.services.sample_data import sample_records
from feedback_intel.utils.helpers import parse_timestamp

@click.group()
def feedbacks():
    """Feedback dashboard utilities."""

@feedbacks.command("report")
@click.option("--marca", default=None, help="Brand filter (default: Todas)")
@click.option("--versao", default=None, help="Version filter (default: Todas)")
@click.option("--formato", default=None, help="Format filter (default: Todos)")
@click.option("--q", "search", default="", help="Theme search text")
@with_appcontext
def feedbacks_report(marca, versao, formato, search):
    """Print the dashboard aggregates as JSON."""
    result = load_records(fallback=False)
    if not result.ok:
        raise click.ClickException(f"Could not load feedbacks: {result.error}")

    state = reporting.FilterState.from_args(
        {"marca": marca, "versao": versao, "formato": formato, "q": search}
    )
    report = reporting.build_report(result.records, state)
    click.echo(json.dumps(report, ensure_ascii=False, indent=2))

@feedbacks.command("seed-sample")
@with_appcontext
def feedbacks_seed_sample():
    """Load the built-in sample rows into an empty (development) database."""
    if db.session.query(Feedback).count():
        raise click.ClickException("Refused: feedbacks table is not empty")

    records = sample_records()
    for record in records:
        values = record.to_dict()
        values["created_at"] = parse_timestamp(values["created_at"])
        db.session.add(Feedback(**values))
    db.session.commit()
    click.echo(f"Seeded {len(records)} sample feedbacks")

def register_cli(app):
    app.cli.add_command(feedbacks)
