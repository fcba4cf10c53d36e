from nyx2048.game_gui import main

main()
