from inkwell._cli import main

main()
