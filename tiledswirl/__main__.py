from tiledswirl.utils.preview import main

if __name__ == "__main__":
    main()
