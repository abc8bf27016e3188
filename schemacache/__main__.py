from schemacache.cli import main

main()
