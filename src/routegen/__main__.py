from routegen._cli import main

main()
