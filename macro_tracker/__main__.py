from macro_tracker.cli import main

main()
