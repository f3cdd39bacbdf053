from json_expressions.cli import main

main()
