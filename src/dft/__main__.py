from dft.cli import main

main()
