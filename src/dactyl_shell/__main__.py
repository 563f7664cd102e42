from .dactyl_manuform import main

main()
