from broadside.main import main

main()
