import click
from roomfinder import db
from roomfinder.models.user import User
from roomfinder.services.engagement_counter import EngagementCounter


def register_commands(app):

    @app.cli.command('reconcile-likes')
    @click.option('--room', 'room_id', default=None, help='Only reconcile this room id.')
    def reconcile_likes(room_id):
        """Recompute room like counters from the like ledger."""
        corrections = EngagementCounter().reconcile(room_id=room_id)
        for rid, old, new in corrections:
            click.echo(f'Fixing like count for room {rid}: {old} -> {new}')
        if corrections:
            click.echo(f'Updated {len(corrections)} room counters.')
        else:
            click.echo('All like counters are consistent.')

    @app.cli.command('promote-admin')
    @click.argument('email')
    def promote_admin(email):
        """Give an existing user the admin role."""
        user = User.query.filter_by(email=email.lower().strip()).first()
        if not user:
            raise click.ClickException(f'No user registered as {email}')
        user.role = 'admin'
        db.session.commit()
        click.echo(f'{user.email} is now an admin.')
