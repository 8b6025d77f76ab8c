from sqlalchemy import Column, Enum, Float, ForeignKey, Integer, Text, text

from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class Users(Base):
    __tablename__ = 'users'

    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    role = Column(Enum('customer', 'owner', 'admin'), nullable=False, server_default=text("'customer'"))
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    is_banned = Column(Integer, nullable=False, server_default=text('0'))
    reward_points = Column(Integer, nullable=False, server_default=text('0'))
    total_spent = Column(Float, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
    phone = Column(Text)
    ban_reason = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    venues = relationship('Venues', back_populates='owner')
    bookings = relationship('Bookings', back_populates='user')
    point_transactions = relationship('PointTransactions', back_populates='user')


class Venues(Base):
    __tablename__ = 'venues'

    name = Column(Text, nullable=False)
    city = Column(Text, nullable=False)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    moderation_status = Column(
        Enum('pending', 'approved', 'rejected'),
        nullable=False,
        server_default=text("'pending'"),
    )
    id = Column(Integer, primary_key=True)
    owner_id = Column(ForeignKey('users.id', ondelete='SET NULL'))
    district = Column(Text)
    address = Column(Text)
    phone = Column(Text)
    description = Column(Text)
    verification_notes = Column(Text)
    verified_at = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    owner = relationship('Users', back_populates='venues')
    courts = relationship('Courts', back_populates='venue')
    bookings = relationship('Bookings', back_populates='venue')


class Courts(Base):
    __tablename__ = 'courts'

    venue_id = Column(ForeignKey('venues.id', ondelete='CASCADE'), nullable=False)
    name = Column(Text, nullable=False)
    sport_type = Column(Text, nullable=False)
    capacity = Column(Integer, nullable=False, server_default=text('2'))
    # JSON: [{"day_of_week": 1, "time_slots": [{"start": "08:00", "end": "22:00"}]}]
    default_availability = Column(Text, nullable=False, server_default=text("'[]'"))
    # JSON: [{"day_type": "weekday", "time_slot": {...}, "price_per_hour": 100000, "is_active": true}]
    pricing = Column(Text, nullable=False, server_default=text("'[]'"))
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)
    court_type = Column(Text)
    surface = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    venue = relationship('Venues', back_populates='courts')
    bookings = relationship('Bookings', back_populates='court')


class Bookings(Base):
    __tablename__ = 'bookings'

    user_id = Column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    court_id = Column(ForeignKey('courts.id', ondelete='CASCADE'), nullable=False)
    venue_id = Column(ForeignKey('venues.id', ondelete='CASCADE'), nullable=False)
    date = Column(Text, nullable=False)
    start_time = Column(Text, nullable=False)
    end_time = Column(Text, nullable=False)
    status = Column(
        Enum('pending', 'confirmed', 'completed', 'cancelled'),
        nullable=False,
        server_default=text("'pending'"),
    )
    total_price = Column(Float, nullable=False, server_default=text('0'))
    discount = Column(Float, nullable=False, server_default=text('0'))
    final_price = Column(Float, nullable=False, server_default=text('0'))
    points_used = Column(Integer, nullable=False, server_default=text('0'))
    points_earned = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
    notes = Column(Text)
    cancel_reason = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    user = relationship('Users', back_populates='bookings')
    court = relationship('Courts', back_populates='bookings')
    venue = relationship('Venues', back_populates='bookings')
    point_transactions = relationship('PointTransactions', back_populates='booking')


class PointTransactions(Base):
    __tablename__ = 'point_transactions'

    user_id = Column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    points = Column(Integer, nullable=False)
    type = Column(Enum('earn', 'redeem', 'refund', 'correction'), nullable=False)
    id = Column(Integer, primary_key=True)
    booking_id = Column(ForeignKey('bookings.id', ondelete='SET NULL'))
    description = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    user = relationship('Users', back_populates='point_transactions')
    booking = relationship('Bookings', back_populates='point_transactions')
