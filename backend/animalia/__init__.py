from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import generate_password_hash
import click
from config import Config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    login_manager.login_view = 'admin.login'
    login_manager.login_message = 'Please log in to access the admin pages.'
    migrate.init_app(flask_app, db)

    # Only the hash of the operator password is kept around
    flask_app.config['ADMIN_PASSWORD_HASH'] = generate_password_hash(
        str(flask_app.config.get('ADMIN_PASSWORD') or '')
    )

    # Import and register blueprints here
    from animalia.main import main
    flask_app.register_blueprint(main)

    from animalia.admin import admin
    flask_app.register_blueprint(admin)

    from animalia.errors import AnimaliaError, StoreFailure

    @flask_app.errorhandler(AnimaliaError)
    def handle_animalia_error(exc):
        return jsonify({'success': False, 'error': exc.message}), exc.status_code

    @flask_app.errorhandler(SQLAlchemyError)
    def handle_store_error(exc):
        db.session.rollback()
        flask_app.logger.exception(f"[store-failure] {exc.__class__.__name__}")
        failure = StoreFailure()
        return jsonify({'success': False, 'error': failure.message}), failure.status_code

    from animalia.models import AdminUser

    @login_manager.user_loader
    def load_user(user_id):
        if user_id == AdminUser.id:
            return AdminUser()
        return None

    @click.command('db-reset')
    @click.option('--rooms', default=4, show_default=True, help='Number of rooms to seed.')
    def db_reset_command(rooms):
        """Drops, recreates, and seeds the database."""
        from animalia.services.admin import AdminService
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            service = AdminService(db.session)
            for room_id in range(1, rooms + 1):
                service.create_room(room_id, f'Szekreny {room_id}')
            print(f'Database has been reset and seeded with {rooms} rooms!')

    @click.command('clear-leaderboards')
    def clear_leaderboards_command():
        """Empties every leaderboard."""
        from animalia.services.admin import AdminService
        with flask_app.app_context():
            cleared = AdminService(db.session).reset_leaderboards()
            print(f'Cleared {cleared} leaderboards.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(clear_leaderboards_command)

    return flask_app
