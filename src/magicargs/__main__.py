from magicargs.magic import main

main()
