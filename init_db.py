"""
Initialize database and create demo users
"""
import os
import sys

# Add app to path
sys.path.insert(0, os.path.dirname(__file__))

from cursalia import create_app, db, seed_categories
from cursalia.models.user import User


def init_database():
    """Create tables, default categories and one demo account per role"""
    app = create_app()

    with app.app_context():
        print("Creating database tables...")
        db.create_all()

        added = seed_categories()
        print(f"Default categories added: {added}")

        demo_users = [
            ('Ana', 'Profesora', 'profesora@cursalia.com', User.ROLE_TEACHER),
            ('Luis', 'Alumno', 'alumno@cursalia.com', User.ROLE_STUDENT),
        ]

        for first_name, last_name, email, role in demo_users:
            if User.query.filter_by(email=email).first():
                continue
            print(f"Creating {role}: {email}...")
            user = User(first_name=first_name, last_name=last_name, email=email, role=role)
            user.set_password('cursalia123')  # Change this in production!
            db.session.add(user)

        db.session.commit()
        print("\nDatabase initialized successfully!")
        print("\nDemo users: profesora@cursalia.com / alumno@cursalia.com, password='cursalia123'")
        print("\nIMPORTANT: Change these passwords in production!")


if __name__ == '__main__':
    init_database()
