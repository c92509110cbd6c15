from formulacalc.cli import main

main()
