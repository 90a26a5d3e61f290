"""Entry point for Streamlit (cloud/local).

Delegates to `streamlit_app.py` so both `streamlit run app.py` and
`streamlit run streamlit_app.py` start the coach.
"""

from streamlit_app import main


if __name__ == "__main__":
    main()
