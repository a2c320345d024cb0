"""Shared pytest fixtures for all tests."""
import pytest


@pytest.fixture
def shop_ddl():
    """Two tables linked by a table-level FOREIGN KEY."""
    return """
    CREATE TABLE customers (id INT PRIMARY KEY, name VARCHAR(100));
    CREATE TABLE orders (id INT PRIMARY KEY, customer_id INT, FOREIGN KEY (customer_id) REFERENCES customers(id));
    """


@pytest.fixture
def convention_ddl():
    """Two tables related only by the customer_id naming convention."""
    return """
    CREATE TABLE customers (id INT PRIMARY KEY);
    CREATE TABLE orders (id INT PRIMARY KEY, customer_id INT);
    """


@pytest.fixture
def blog_ddl():
    """Mixed inline/table-level keys, comments, quoting and nested parens."""
    return """
    -- Blog schema
    CREATE TABLE IF NOT EXISTS `users` (
        `id` INT NOT NULL AUTO_INCREMENT,
        email VARCHAR(255) NOT NULL, -- login
        balance DECIMAL(10, 2) DEFAULT 0.00 CHECK (balance >= 0),
        PRIMARY KEY (`id`),
        UNIQUE KEY uq_email (email)
    );

    CREATE TABLE "posts" (
        id SERIAL PRIMARY KEY,
        author_id INT REFERENCES users(id) ON DELETE CASCADE,
        title TEXT NOT NULL
    );

    CREATE TABLE comments (
        id SERIAL,
        post_id INT NOT NULL,
        user_id INT,
        body TEXT,
        CONSTRAINT pk_comments PRIMARY KEY (id),
        CONSTRAINT fk_post FOREIGN KEY (post_id) REFERENCES posts (id),
        FOREIGN KEY (user_id) REFERENCES users
    );

    CREATE INDEX idx_posts_author ON posts (author_id);
    """
