from deckhand.cli import main

main()
