from azmigrate.cli import main

main()
