from leadmerge.cli import main

main()
