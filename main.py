"""
Termo Game Server - Main Entry Point

This is the main entry point for the termo game server.
It loads the word corpus, initializes the game service and starts the
Flask-SocketIO application.
"""

import os
from termo import create_app
from termo.config import config, WordCorpusError
from termo.services.game_service import initialize_game_service
from termo.services.word_corpus import WordCorpus
from termo.utils.game_logger import game_logger


def main():
    """Main function to start the termo server."""
    config_class = config[os.getenv('FLASK_ENV', 'default')]

    try:
        print("Initializing Termo Game Server...")

        corpus = WordCorpus.from_json(config_class.WORDS_FILE)
        stats = corpus.statistics()
        print(f"✓ Word corpus loaded: {stats['total_words']} targets, {stats['accepted_words']} accepted words")

        initialize_game_service(
            corpus,
            notice_seconds=config_class.NOTICE_CLEAR_SECONDS,
            default_mode=config_class.DEFAULT_MODE
        )
        print("✓ Game service initialized")

        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Termo Server Starting")

        print(f"\nStarting Termo Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except WordCorpusError as e:
        print(f"Word corpus validation failed: {e}")
        game_logger.logger.error(f"Word corpus validation failed: {e}")
        raise SystemExit(1)
    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Termo Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
