from codegraph_sorter.cli import main

main()
