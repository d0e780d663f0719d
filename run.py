# run.py
import os
import logging
import click
from flask.cli import with_appcontext
from marketplace import create_app, db
from marketplace.seed import seed_database, SEED_PASSWORD

app = create_app()
logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)


@app.cli.command('init-db')
@with_appcontext
def init_db():
    db.create_all()
    click.echo('Database initialized.')


@app.cli.command('seed')
@with_appcontext
def seed():
    counts = seed_database()
    click.echo(f"Seeded {counts['users']} users, {counts['products']} products, "
               f"{counts['transactions']} transaction(s). Password for all accounts: {SEED_PASSWORD}")


if __name__ == '__main__':
    app.run(debug=os.getenv('FLASK_DEBUG') == '1', host='0.0.0.0', port=int(os.getenv('PORT', 5000)))
